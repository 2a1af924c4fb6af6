"""Session authentication against the MagnetCraft backend."""
