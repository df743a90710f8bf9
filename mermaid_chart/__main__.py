import argparse
import json
import logging
import sys

from .core import config
from .core.ast_parser import AnalysisOptions, analyze_file, detect_language
from .core.diagrams import DiagramService, GenerationOptions, RenderOptions
from .core.diagrams.models import DIRECTIONS, THEMES
from .core.exceptions import MermaidChartError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logging(log_level: str = "INFO") -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )
    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)


logger = logging.getLogger(__name__)


def _analysis_options(args) -> AnalysisOptions:
    return AnalysisOptions(include_private=not args.exclude_private, max_depth=args.max_depth)


def _read(path: str) -> str:
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()


def cmd_analyze(args) -> int:
    result = analyze_file(args.file, _analysis_options(args))
    print(json.dumps(result.to_dict(), indent=2))
    return 0


def cmd_generate(args) -> int:
    language = detect_language(args.file)
    if language is None:
        raise ValueError(f"Unsupported file type: {args.file}")

    service = DiagramService()
    result = service.generate(
        _read(args.file),
        language=language,
        analysis_options=_analysis_options(args),
        generation_options=GenerationOptions(
            direction=args.direction,
            include_title=bool(args.title),
            title=args.title,
            theme=args.theme,
        ),
        render=bool(args.svg),
        render_options=RenderOptions(theme=args.theme),
    )
    print(result["mermaidCode"])

    if args.svg:
        if "svg" not in result:
            logger.error("SVG rendering failed: %s", result["renderError"]["message"])
            return 1
        with open(args.svg, "w", encoding="utf-8") as f:
            f.write(result["svg"]["svg"])
        logger.info("Wrote SVG to %s", args.svg)
    return 0


def cmd_serve(args) -> int:
    import uvicorn

    from .api.app import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mermaid_chart", description="Source code to Mermaid class diagrams")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=config.log_level().upper(),
        help="Logging level (default: INFO)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def add_analysis_args(p):
        p.add_argument("file", help="Source file to analyze")
        p.add_argument("--exclude-private", action="store_true", help="Drop private members")
        p.add_argument("--max-depth", type=int, default=5, help="Declaration nesting depth (1-10)")

    analyze = sub.add_parser("analyze", help="Print the structural analysis as JSON")
    add_analysis_args(analyze)
    analyze.set_defaults(func=cmd_analyze)

    generate = sub.add_parser("generate", help="Print a Mermaid class diagram")
    add_analysis_args(generate)
    generate.add_argument("--direction", choices=DIRECTIONS, default="TB")
    generate.add_argument("--title", default=None)
    generate.add_argument("--theme", choices=THEMES, default="default")
    generate.add_argument("--svg", metavar="OUT", help="Also render to this SVG file")
    generate.set_defaults(func=cmd_generate)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    # argparse does not check defaults against choices
    if args.log_level not in LOG_LEVELS:
        parser.error(f"invalid MERMAID_CHART_LOG_LEVEL: {args.log_level!r}")
    setup_logging(args.log_level)

    try:
        return args.func(args)
    except MermaidChartError as e:
        logger.error("%s: %s", e.code, e.message)
        return 1
    except (ValueError, OSError) as e:
        logger.error("%s", e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
