"""
Services package - validation and normalization of the registry configuration.

Contains:
- storage_normalizer: backend selection, defaults, deprecated flag migration
- admission: request admission limit clamping
- lifecycle: management-state parsing and legality matrix
- status_projector: status derivation after reconciliation
- config_validator: composition root returning ValidationResult
"""
