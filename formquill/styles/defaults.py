"""Built-in stylesheet values.

Stylesheet files use the same nested shape; any key they omit falls back to
the value here.
"""

DEFAULT_STYLESHEET = {
    "page": {
        "size": "letter",
        "margins": {"top": 72, "right": 50, "bottom": 60, "left": 50},
    },
    "fonts": {
        "family": "Helvetica",
        "boldFamily": "Helvetica-Bold",
        "sizes": {
            "title": 18,
            "heading": 14,
            "body": 11,
            "label": 10,
            "field": 10,
            "header": 9,
            "footer": 8,
        },
    },
    "colors": {
        "text": "#333333",
        "heading": "#1a1a2e",
        "label": "#333333",
        "border": "#999999",
        "fieldBackground": "#ffffff",
        "header": "#666666",
        "footer": "#666666",
        "rule": "#cccccc",
        "muted": "#888888",
    },
}
