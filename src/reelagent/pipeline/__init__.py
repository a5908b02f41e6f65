"""End-to-end project pipeline."""
