"""docloom — Javadoc generation and PlantUML class diagrams for Java source trees."""

__version__ = "0.1.0"
