"""Command-line sub-applications for Taskboard."""
