"""Transport, decoding, pagination and mutation building blocks."""
