from docfin.analysis.ai_extractor import AIStructuredExtractor
from docfin.analysis.factory import AIExtractorFactory
from docfin.analysis.fallback import FallbackExtractor
from docfin.analysis.validator import repair

__all__ = ["AIExtractorFactory", "AIStructuredExtractor", "FallbackExtractor", "repair"]
