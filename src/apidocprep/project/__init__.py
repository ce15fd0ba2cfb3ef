"""Documentation project files, build items and build properties."""
