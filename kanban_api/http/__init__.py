"""HTTP plumbing: problem+json handlers, error mapping and request ids."""
