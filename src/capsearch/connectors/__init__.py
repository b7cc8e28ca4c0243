"""Backend connector layer — Pluggable connectors for record backends.

Built-in connectors:
  - memory: In-process record list with configurable capabilities
  - meilisearch: MeiliSearch documents API (native paging and equality filters)

Implement ``BackendConnector`` to connect your own backend.
"""
