# pineblog-core - Components (one package per command/query family)
