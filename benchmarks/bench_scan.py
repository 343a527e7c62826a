#!/usr/bin/env python3
"""
anot Benchmark: full-pipeline scan timing

Times repeated scans of a source tree, sequential and with a thread pool.

Usage:
    python benchmarks/bench_scan.py ./alacritty/ --tags hypothesis,note,todo
"""

import argparse
import time
from statistics import mean

from anot.registry import LanguageRegistry
from anot.scanner import AnnotationScanner
from anot.tags import parse_tag_list

parser = argparse.ArgumentParser(description="Benchmark anot scans")
parser.add_argument("path", help="Directory to scan")
parser.add_argument("--tags", default="hypothesis,note,todo")
parser.add_argument("--runs", type=int, default=5)
parser.add_argument("--workers", type=int, default=4)
args = parser.parse_args()

print("=" * 80)
print(" " * 28 + "ANOT SCAN BENCHMARK")
print("=" * 80)

registry = LanguageRegistry()
tags = parse_tag_list(args.tags)

for workers in (1, args.workers):
    scanner = AnnotationScanner(registry, tags=tags, workers=workers)
    timings = []
    report = None
    for _ in range(args.runs):
        start = time.perf_counter()
        report = scanner.scan_path(args.path)
        timings.append(time.perf_counter() - start)

    print(f"\nworkers={workers}")
    print(f"  files:       {report.files_scanned}")
    print(f"  annotations: {len(report.annotations)}")
    print(f"  errors:      {len(report.errors)}")
    print(f"  mean:        {mean(timings) * 1000:.1f} ms")
    print(f"  best:        {min(timings) * 1000:.1f} ms")
