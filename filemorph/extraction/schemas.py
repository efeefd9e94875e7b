"""JSON schemas sent with extraction requests as the required output shape."""

TABLE_SCHEMA_NAME = "extracted_tables"
OCR_SCHEMA_NAME = "ocr_blocks"

TABLE_ITEM_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "sheetName": {
            "type": "string",
            "description": "A descriptive name for the spreadsheet tab",
        },
        "headers": {
            "type": "array",
            "items": {"type": "string"},
            "description": "The column headers",
        },
        "rows": {
            "type": "array",
            "items": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Cell values",
            },
            "description": "Data rows",
        },
    },
    "required": ["sheetName", "headers", "rows"],
    "additionalProperties": False,
}

# Structured-output endpoints require an object at the root, so the table
# array is wrapped. A bare array is still accepted when parsing.
TABLE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {"tables": {"type": "array", "items": TABLE_ITEM_SCHEMA}},
    "required": ["tables"],
    "additionalProperties": False,
}

OCR_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "blocks": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "text": {"type": "string"},
                    "box_2d": {
                        "type": "array",
                        "items": {"type": "number"},
                        "description": "Bounding box [ymin, xmin, ymax, xmax] on a 0-1000 scale",
                    },
                },
                "required": ["text", "box_2d"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["blocks"],
    "additionalProperties": False,
}
