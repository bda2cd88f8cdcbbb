"""Infrastructure layer — bridges to third-party graph libraries."""
