"""Adaptadores: red, DNS, OpenPGP, checks concretos y exportadores de reportes."""
