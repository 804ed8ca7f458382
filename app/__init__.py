"""Admin console backend for the food redistribution platform."""
