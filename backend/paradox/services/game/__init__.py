"""Game domain services: scoring, settlement, round lifecycle.

Routes and socket handlers call into this package; it owns every write to
teams, rounds, submissions and settings, and publishes broadcast events once
the corresponding transaction has committed.
"""
