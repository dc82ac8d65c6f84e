#!/usr/bin/env python3
"""
패키지 설명 JSON을 읽어 모든 클래스를 해석하고 덤프를 출력하는 스크립트

Usage:
    python -m jsbind Atomic.json
    python -m jsbind Atomic.json --class Vector3 --class Node
"""

import argparse
import sys
from pathlib import Path

from .errors import DiagnosticKind
from .loader import PackageLoader


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog='jsbind',
        description='Resolve bindable native classes and dump the result'
    )
    parser.add_argument('package', help='Package description JSON')
    parser.add_argument('--class', dest='classes', action='append', default=[],
                        help='Only dump this class (repeatable)')
    parser.add_argument('--quiet', action='store_true', help='Do not print class dumps')
    args = parser.parse_args(argv)

    package_path = Path(args.package)
    if not package_path.exists():
        print(f"[jsbind] Error: file not found: {package_path}")
        return 1

    package = PackageLoader().load(package_path)
    classes = package.process_classes()

    if not args.quiet:
        selected = set(args.classes)
        for klass in classes:
            if selected and klass.name not in selected:
                continue
            print(klass.dump())

    failures = [
        d for klass in classes for d in klass.diagnostics
        if d.kind == DiagnosticKind.PIPELINE_FAILURE
    ]
    for diagnostic in failures:
        print(f"[jsbind] Failed: {diagnostic}")

    return 1 if failures else 0


if __name__ == '__main__':
    sys.exit(main())
