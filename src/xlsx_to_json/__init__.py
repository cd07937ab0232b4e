from .sdk import (
    XlsxToJsonWorkflow,
    WorkflowConfig,
    OutputItem,
    WorkflowError,
)

__version__ = "0.4.15"

__all__ = ["XlsxToJsonWorkflow", "WorkflowConfig", "OutputItem", "WorkflowError"]
