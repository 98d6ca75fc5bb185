"""Turn OpenAPI documents into a flat, deduplicated model list for templates."""

from .config import Config, load_config, parse_config
from .context_builder import build_context
from .flatten import combine, flatten
from .models import DataStructure, EndpointExtracted, PropertyType, TemplateData
from .naming import finalize
from .samples import SampleMode, synthesize
from .schema_parser import build
from .type_mapper import map_type

__version__ = "0.1.0"

__all__ = [
    "Config",
    "DataStructure",
    "EndpointExtracted",
    "PropertyType",
    "SampleMode",
    "TemplateData",
    "build",
    "build_context",
    "combine",
    "finalize",
    "flatten",
    "load_config",
    "map_type",
    "parse_config",
    "synthesize",
]
