"""Timeline edit compilation and time mapping."""
