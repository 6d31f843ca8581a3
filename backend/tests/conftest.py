import os

# Settings are loaded at import time and the API key is required.
os.environ.setdefault("GOOGLE_MAPS_API_KEY", "test-maps-key")
