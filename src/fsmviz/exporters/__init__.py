"""Output formats for state diagrams."""
