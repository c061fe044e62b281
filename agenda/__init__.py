"""team-agenda: team task scheduling and time-slot layout."""
