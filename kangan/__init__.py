"""Admin console two-factor login for the Harsh Kangan store."""
