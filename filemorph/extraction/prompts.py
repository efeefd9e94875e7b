SYSTEM_PROMPT = (
    "You are a professional data extraction engine. Output clean, structured JSON only."
)

TABLE_PROMPT = """Extract structured tables from these images.
1. Summarize content in 'Document Summary'.
2. Map all tables precisely.
3. Ensure numerical precision."""

OCR_PROMPT = "Extract all visible text from this image with bounding boxes."
