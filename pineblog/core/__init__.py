# pineblog-core - Core (Result, errors, entities, dispatcher, ports)
