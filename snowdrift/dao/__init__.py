"""Data access objects for link storage backends."""
