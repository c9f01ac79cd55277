"""GenieCMS: Markdown pages, short-link redirects and cookie-based accounts on FastAPI."""
