"""HTTP surface: routes, request/response models and error handlers."""
