"""
sqlweave Plugin Main Module.

This module serves as the main entry point for the sqlweave plugin, a ChRIS
"ds" plugin that expands conditional SQL query templates.

Features:
- Reads every template under the input directory matching a glob pattern
- Expands each template with substitution values given as JSON
- Writes the expanded text to the same relative path in the output directory
- Optionally prints the parsed structure of each template

Usage:
    Run this module as a standalone script or through the `sqlweave` command.

Examples:
    Expand templates with inline arguments:
        $ sqlweave --args '{"IncludeReviews": true}' in/ out/

    Expand templates with arguments from a file:
        $ sqlweave --argsFile params.json --pattern '**/*.tmpl' in/ out/

    Show how each template is parsed:
        $ sqlweave --args '{}' --showAST in/ out/

Note:
    Without --args or --argsFile the templates are copied through unchanged.
    --argsFile takes priority over --args.
"""

from pathlib import Path
from argparse import Namespace, ArgumentParser, ArgumentDefaultsHelpFormatter
from chris_plugin import chris_plugin
from sqlweave.config.settings import console
from sqlweave.lib.display import syntaxTree_show
from sqlweave.lib.errors import TemplateError
from sqlweave.lib.log import LOG
from sqlweave.lib.parser import TemplateParser, parser_default
from sqlweave.models.dataModel import ParseResult
import json
import sys
from typing import Any, Final

__version__: Final[str] = "0.1.0"

DISPLAY_TITLE: Final[str] = "sqlweave: conditional SQL template expansion"

# Define the argument parser for the plugin
parser: Final[ArgumentParser] = ArgumentParser(
    description="A ChRIS plugin that expands conditional SQL query templates.",
    formatter_class=ArgumentDefaultsHelpFormatter,
)
parser.add_argument(
    "--args", type=str, default="", help="JSON object of substitution values"
)
parser.add_argument(
    "--argsFile", type=str, default="", help="JSON file of substitution values"
)
parser.add_argument(
    "--pattern", type=str, default="**/*.sql", help="Glob selecting input templates"
)
parser.add_argument(
    "--showAST", action="store_true", help="Print the parsed structure of each template"
)
parser.add_argument(
    "-V", "--version", action="version", version=f"%(prog)s {__version__}"
)


def args_load(options: Namespace) -> Any:
    """Load substitution values from the command-line options.

    Args:
        options: Parsed command-line arguments

    Returns:
        The decoded JSON value, or None if no arguments were given

    Raises:
        ValueError: If the JSON cannot be decoded
        OSError: If the arguments file cannot be read
    """
    if options.argsFile:
        return json.loads(Path(options.argsFile).read_text(encoding="utf-8"))
    if options.args:
        return json.loads(options.args)
    return None


def template_process(
    input_file: Path,
    output_file: Path,
    template_parser: TemplateParser,
    args: Any,
    show_ast: bool = False,
) -> ParseResult:
    """Expand one template file into the output location.

    Args:
        input_file: Template to read
        output_file: Destination of the expanded text
        template_parser: Parser used for expansion
        args: Substitution values
        show_ast: Print the parsed structure before expanding

    Returns:
        ParseResult of the expansion. Nothing is written on failure.
    """
    template: str = input_file.read_text(encoding="utf-8")

    if show_ast:
        try:
            console.print(
                syntaxTree_show(template_parser.syntaxTree_build(template), input_file.name)
            )
        except TemplateError as e:
            LOG(f"Could not show AST for {input_file}: {e}")

    result: ParseResult = template_parser.parse(template, args)
    if result.success:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        # Templates passed through without args are copied byte for byte
        text: str = result.text if args is None else result.text + "\n"
        output_file.write_text(text, encoding="utf-8")
    return result


def files_process(options: Namespace, inputdir: Path, outputdir: Path) -> int:
    """Expand every matching template under inputdir.

    Args:
        options: Parsed command-line arguments
        inputdir: Directory containing templates
        outputdir: Directory for expanded output

    Returns:
        int: Process exit code, 0 if every template expanded
    """
    try:
        args: Any = args_load(options)
    except (ValueError, OSError) as e:
        console.print(f"[bold red]Could not load arguments:[/bold red] {e}")
        return 1

    template_parser: TemplateParser = parser_default()
    exit_code: int = 0
    count: int = 0
    for input_file in sorted(inputdir.glob(options.pattern)):
        if not input_file.is_file():
            continue
        count += 1
        output_file: Path = outputdir / input_file.relative_to(inputdir)
        result: ParseResult = template_process(
            input_file, output_file, template_parser, args, options.showAST
        )
        if not result.success:
            console.print(f"[bold red]{input_file}:[/bold red] {result.error}")
            exit_code = 1

    LOG(f"Processed {count} template(s) from {inputdir}")
    if not count:
        console.print(
            f"[bold yellow]No templates matching '{options.pattern}' in {inputdir}[/bold yellow]"
        )
    return exit_code


@chris_plugin(
    parser=parser,
    title="pl-sqlweave",
    category="",
    min_memory_limit="100Mi",
    min_cpu_limit="1000m",
    min_gpu_limit=0,
)
def main(options: Namespace, inputdir: Path, outputdir: Path) -> None:
    """Main entry point for the ChRIS plugin.

    Args:
        options: Parsed command-line options
        inputdir: Directory containing input templates
        outputdir: Directory for expanded output
    """
    console.print(DISPLAY_TITLE)
    exit_code: int = files_process(options, inputdir, outputdir)
    if exit_code:
        sys.exit(exit_code)
