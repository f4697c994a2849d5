"""Infrastructure layer: task sources behind the normalization cycle."""
