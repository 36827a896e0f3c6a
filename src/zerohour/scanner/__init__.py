"""External scanner integration."""
