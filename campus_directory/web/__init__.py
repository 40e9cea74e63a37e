"""HTTP surface for the campus directory."""
