"""Model extraction: phase rules plus relationship discovery passes."""

from archiexport.extractor.builder import ModelBuilder
from archiexport.extractor.extractor import ModelExtractor, extract_model
from archiexport.extractor.names import normalize_name
from archiexport.extractor.phases import Phase, detect_phase
from archiexport.extractor.relationships import NameIndex, names_match
from archiexport.extractor.technology import infer_technology_type

__all__ = [
    "ModelBuilder",
    "ModelExtractor",
    "NameIndex",
    "Phase",
    "detect_phase",
    "extract_model",
    "infer_technology_type",
    "names_match",
    "normalize_name",
]
