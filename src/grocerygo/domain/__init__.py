"""Domain value types and pricing rules."""
