"""Services package for Buildflow."""

from .export import ArtifactExporter, ExportOutput, workflow_name

__all__ = ["ArtifactExporter", "ExportOutput", "workflow_name"]
