# pineblog-core - Adapters (local implementations of the core ports)
