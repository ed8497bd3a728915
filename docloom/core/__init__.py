# Core services are imported from their subpackages directly:
#   docloom.core.diagrams, docloom.core.javadoc, docloom.core.config
