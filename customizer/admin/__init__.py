"""Admin-side garment editing."""
