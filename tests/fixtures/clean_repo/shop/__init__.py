"""Example shop following the four-layer convention."""
