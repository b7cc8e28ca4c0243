from capsearch.connectors.meilisearch.connector import MeiliSearchConnector

__all__ = ["MeiliSearchConnector"]
