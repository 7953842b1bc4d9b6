LOGGER_NAME = "fiery_dragons"
