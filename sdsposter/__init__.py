"""
SDS Poster - Trilingual hazard posters from safety data sheets.

Example:
    >>> from sdsposter.domains.extraction import HazardExtractor
    >>> from sdsposter.adapters.gemini import GeminiClient
    >>> extractor = HazardExtractor(GeminiClient())
    >>> record = await extractor.analyze(pdf_bytes, "application/pdf", api_key)
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
