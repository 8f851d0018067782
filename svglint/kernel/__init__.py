"""svglint kernel: document model, configuration and the linting engine."""
