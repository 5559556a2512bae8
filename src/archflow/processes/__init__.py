"""
Built-in software-architecture processes.

Each module defines its tasks with `define_task` and one process function
decorated with `@process`.
"""

from archflow.processes.c4_model_documentation import c4_model_documentation
from archflow.processes.event_storming import event_storming
from archflow.processes.iac_review import iac_review
from archflow.processes.microservices_decomposition import microservices_decomposition
from archflow.processes.migration_strategy import migration_strategy
from archflow.processes.observability_implementation import (
    observability_implementation,
)
from archflow.processes.performance_optimization import performance_optimization
from archflow.processes.quality_attributes_workshop import quality_attributes_workshop
from archflow.processes.security_architecture_review import (
    security_architecture_review,
)

BUILTIN_PROCESSES = (
    c4_model_documentation,
    event_storming,
    iac_review,
    microservices_decomposition,
    migration_strategy,
    observability_implementation,
    performance_optimization,
    quality_attributes_workshop,
    security_architecture_review,
)

__all__ = [
    "BUILTIN_PROCESSES",
    "c4_model_documentation",
    "event_storming",
    "iac_review",
    "microservices_decomposition",
    "migration_strategy",
    "observability_implementation",
    "performance_optimization",
    "quality_attributes_workshop",
    "security_architecture_review",
]
