from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

from .config import OccConfig, load_config
from .errors import OccUserError
from .repl import Repl
from .runtime.context import constant
from .runtime.runtime import Runtime, RuntimeOptions
from .template.parser import compile_template
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="occ",
        description="OCC template language",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("file", nargs="?", help="исполнить шаблон из файла")
    p.add_argument("-e", "--eval", metavar="CODE", help="исполнить шаблон, переданный строкой")
    p.add_argument("--config", metavar="PATH", help="путь к occ.yaml (по умолчанию ./occ.yaml, если есть)")
    p.add_argument("--timeout", type=float, metavar="MS", help="максимальное время выполнения в миллисекундах")
    p.add_argument("--seed", type=int, help="зерно для встроенных random-тегов")
    p.add_argument(
        "--var",
        action="append",
        metavar="NAME=VALUE",
        help="константный тег {NAME} (можно указать несколько)",
    )
    p.add_argument("--verbose", action="store_true", help="отладочный лог в stderr")
    return p


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or os.environ.get("OCC_DEBUG") else logging.WARNING
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s", stream=sys.stderr)


def _parse_vars(specs: Optional[List[str]]) -> Dict[str, str]:
    """Парсит список 'name=value' в словарь."""
    result: Dict[str, str] = {}
    if not specs:
        return result

    for spec in specs:
        if "=" not in spec:
            raise ValueError(f"Invalid variable format '{spec}'. Expected 'name=value'")
        name, value = spec.split("=", 1)
        result[name.strip()] = value

    return result


def _options(ns: argparse.Namespace) -> RuntimeOptions:
    cfg: OccConfig = load_config(Path(ns.config) if ns.config else None)
    options = cfg.to_runtime_options()

    # Флаги командной строки перекрывают файл
    if ns.timeout is not None:
        options.timeout = ns.timeout
    if ns.seed is not None:
        options.seed = ns.seed
    for name, value in _parse_vars(ns.var).items():
        options.context[name] = constant(value)

    return options


def run_template(code: str, options: Optional[RuntimeOptions] = None) -> str:
    return Runtime(compile_template(code), options).start()


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.verbose)

    try:
        options = _options(ns)

        if ns.file:
            text = Path(ns.file).read_text(encoding="utf-8")
            sys.stdout.write(run_template(text, options))
            return 0

        if ns.eval is not None:
            sys.stdout.write(run_template(ns.eval, options) + "\n")
            return 0

        Repl(options).run()
        return 0

    except OccUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except (ValueError, OSError) as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
