import argparse
import logging
import sys
from pathlib import Path

from .core.config import get_settings
from .core.errors import DocloomError


def setup_logging(log_level: str = "INFO") -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )
    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)


logger = logging.getLogger(__name__)


def _serve(args, settings) -> int:
    from .api.app import create_app
    import uvicorn

    app = create_app(settings)
    host = args.host or settings.server.host
    port = args.port or settings.server.port

    logger.info(f"Starting FastAPI server on http://{host}:{port}")
    print(f"\n  docloom is running at: http://localhost:{port}")
    print(f"  API docs at: http://localhost:{port}/docs\n")

    uvicorn.run(app, host=host, port=port, log_level=args.log_level.lower())
    return 0


def _uml(args, settings) -> int:
    from .core.diagrams import DiagramService

    service = DiagramService(settings)
    if args.format == "puml":
        document = service.generate_source(args.directory)
        if args.output:
            Path(args.output).write_text(document.source, encoding="utf-8")
            logger.info(f"PlantUML written to {args.output}")
        else:
            sys.stdout.write(document.source)
        return 0

    image = service.render(args.directory, args.format)
    output = Path(args.output or f"diagram.{args.format}")
    output.write_bytes(image)
    logger.info(f"Diagram written to {output}")
    return 0


def _javadoc(args, settings) -> int:
    from .core.javadoc import JavadocService

    result = JavadocService(settings.javadoc).generate_docs(args.directory, args.classpath)
    print(result.message)
    return 0


def main(argv=None) -> int:
    """Main entry point for docloom."""
    parser = argparse.ArgumentParser(description="docloom - Javadoc and UML class diagrams for Java sources")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )
    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", type=str, default=None, help="Bind address (default from config)")
    serve.add_argument("--port", type=int, default=None, help="Port for the API server (default from config)")

    uml = subparsers.add_parser("uml", help="Generate a class diagram for a directory")
    uml.add_argument("directory", help="Directory of Java sources")
    uml.add_argument(
        "--format",
        choices=["puml", "svg", "png"],
        default="puml",
        help="PlantUML source (default) or a rendered image"
    )
    uml.add_argument("-o", "--output", help="Output file (PlantUML defaults to stdout)")

    javadoc = subparsers.add_parser("javadoc", help="Generate Javadoc for a directory")
    javadoc.add_argument("directory", help="Directory of Java sources")
    javadoc.add_argument("--classpath", default=None, help="Extra classpath entries")

    args = parser.parse_args(argv)
    if args.command is None:
        args = parser.parse_args(["--log-level", args.log_level, "serve"])

    setup_logging(args.log_level)

    try:
        settings = get_settings()
        handler = {"serve": _serve, "uml": _uml, "javadoc": _javadoc}[args.command]
        return handler(args, settings)
    except DocloomError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
