"""HTTP surface for building and previewing paths."""
