"""Request-level helpers: multi-valued mappings, request dictionaries and cookie auth."""
