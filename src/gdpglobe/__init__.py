"""Interactive 3D globe of national GDP estimates."""
