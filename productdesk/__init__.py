"""ProductDesk: product and category catalog management API."""
