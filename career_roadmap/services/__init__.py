"""Service exports."""

from .document_store import DocumentStore, InMemoryDocumentStore
from .http_client import error_message_for_status, post_json
from .resume_api_client import request_resume_analysis
from .roadmap_client import build_roadmap_request, generate_roadmap, run_roadmap_generation
from .roadmap_service import (
    delete_roadmaps,
    load_resume_analysis,
    load_roadmap,
    load_target_companies,
    regenerate_roadmap,
    save_resume_analysis,
    save_roadmap,
    save_target_companies,
)

__all__ = [
    "DocumentStore",
    "InMemoryDocumentStore",
    "post_json",
    "error_message_for_status",
    "request_resume_analysis",
    "build_roadmap_request",
    "generate_roadmap",
    "run_roadmap_generation",
    "load_resume_analysis",
    "save_resume_analysis",
    "load_target_companies",
    "save_target_companies",
    "load_roadmap",
    "save_roadmap",
    "delete_roadmaps",
    "regenerate_roadmap",
]
