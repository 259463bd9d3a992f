"""Quest-adventurer matching and recommendation engine."""
