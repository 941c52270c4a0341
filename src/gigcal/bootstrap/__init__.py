"""Bootstrap (composition root) for GIGCAL.

Assembles the application at runtime: wires concrete adapters to the
service-layer handlers, builds the message bus and the unit-of-work factory,
and reads configuration.

Import rules:
- Entry points import *this* package (not adapters/service_layer/interfaces/domain).
- This package may import: `gigcal.adapters`, `gigcal.service_layer`,
  `gigcal.interfaces`, `gigcal.domain`, and `gigcal.config`.
- Inner layers must not import `gigcal.bootstrap`.
"""

from .bootstrap import AppContainer, bootstrap, bootstrap_in_memory

__all__ = ["AppContainer", "bootstrap", "bootstrap_in_memory"]
