"""Developer CLI for the workout conflict engine."""
