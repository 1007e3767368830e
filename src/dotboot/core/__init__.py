"""Core utilities shared by the bootstrap stages."""
