"""
Storage abstractions for the logger runtime.

Includes:
- LogStore: append-only JSONL files per (server, resource), with bounded tail
  reads, truncation and directory listings
"""
