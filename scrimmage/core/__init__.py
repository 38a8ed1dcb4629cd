"""Core enums, ratings and models shared by the simulation."""
