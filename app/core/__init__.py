# Core infrastructure: config, database, errors, logging, middleware
