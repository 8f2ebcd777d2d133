"""CineBox cinema ticketing backend."""
