"""Prompt template for product packaging extraction.

The model is asked for a single JSON object whose keys match the camelCase
aliases of ExtractedAttributes, so a parsed response validates directly.
Quality fields use the four-level vocabulary poor/average/good/excellent;
unreadable fields are reported as "Unknown" or "Not visible".
"""

PRODUCT_EXTRACTION_PROMPT = """Analyze this product image thoroughly and extract the following information in JSON format:
{
  "brandName": "exact brand name visible",
  "productName": "product name/model",
  "category": "product category (e.g., pharmaceuticals, electronics, food, fashion)",
  "packagingQuality": "poor/average/good/excellent",
  "imageQuality": "poor/average/good/excellent",
  "textClarity": "poor/average/good/excellent (how clear is text on packaging)",
  "batchNumber": "batch/lot number if visible",
  "manufacturingDate": "manufacturing date if visible",
  "expiryDate": "expiry date if visible",
  "suspiciousElements": ["list any suspicious elements like misspellings, poor printing, blurry text, misaligned labels, etc"],
  "legitimacyIndicators": ["list quality indicators like holograms, proper seals, QR codes, professional printing, etc"],
  "overallImpression": "brief assessment of authenticity"
}

Be extremely thorough and critical. Look for:
- Print quality and clarity
- Spelling and grammar errors
- Professional packaging design
- Presence of security features
- Label alignment and quality
- Color consistency
- Any signs of tampering
- Font quality and consistency

If you cannot clearly identify something, indicate "Unknown" or "Not visible".
Respond with the JSON object only."""
