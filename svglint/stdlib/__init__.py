"""Standard library of svglint rules."""
