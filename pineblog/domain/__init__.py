# pineblog-core - Domain (pure functions: validation, content transforms)
