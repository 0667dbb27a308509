"""GraphQL fragment loader - #import resolution and per-operation documents."""

from .assembler import DocumentAssembler
from .compiler import ArtifactSet, CompileResult, DocumentCompiler, NamingViolation
from .config import DanglingReferencePolicy, LoaderConfig, OutputFormat
from .imports import import_path, scan_imports
from .loader import DocumentLoader, ImportCycleError, LoaderError, UnresolvedImportError
from .merger import FragmentRegistry, merge_definitions
from .references import ReferenceGraph, build_reference_graph, collect_references

__version__ = "0.1.0"

__all__ = [
    "ArtifactSet",
    "CompileResult",
    "DanglingReferencePolicy",
    "DocumentAssembler",
    "DocumentCompiler",
    "DocumentLoader",
    "FragmentRegistry",
    "ImportCycleError",
    "LoaderConfig",
    "LoaderError",
    "NamingViolation",
    "OutputFormat",
    "ReferenceGraph",
    "UnresolvedImportError",
    "build_reference_graph",
    "collect_references",
    "import_path",
    "merge_definitions",
    "scan_imports",
]
