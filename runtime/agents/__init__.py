"""
Agents used by the logger runtime.

For now there is a single IngestAgent that:

- receives one raw record posted to /log
- decides which (server, resource) file it belongs to
- appends it to the LogStore and echoes it to the console log
"""
