from capsearch.connectors.memory.connector import CallLog, ListingCall, MemoryConnector

__all__ = ["CallLog", "ListingCall", "MemoryConnector"]
