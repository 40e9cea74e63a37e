"""Campus directory lookup API."""
