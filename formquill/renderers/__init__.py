"""Output backends translating layout placements into PDF, DOCX and HTML."""
