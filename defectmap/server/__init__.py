"""HTTP interface for the defect map editor."""
