"""Report display for the scan command.

Prints the banner, every requested report section and the closing
summary. Report bodies come from the pure renderers in
``dirscan.reports`` and are printed verbatim.
"""

from rich.markup import escape

from dirscan.reports import (
    compute_statistics,
    render_flat_list,
    render_statistics,
    render_structured_dump,
    render_tabular_dump,
)
from dirscan.scanning.models import OutputMode, ScanConfig, ScanResult
from dirscan.scanning.tree import iter_tree
from dirscan.utils.formatting import (
    console,
    print_heading,
    print_plain,
    print_success,
    safe_text,
)

BANNER_TITLE = "Directory Scanner"

# Section titles in rendering order
SECTION_TITLES: dict[OutputMode, str] = {
    OutputMode.TREE: "Directory Tree",
    OutputMode.STATS: "Statistics",
    OutputMode.JSON: "JSON Output",
    OutputMode.CSV: "CSV Output",
    OutputMode.LIST: "Found Files",
}


def print_banner(config: ScanConfig) -> None:
    """Print the scan banner with root and depth bound."""
    console.print(f"[bold_header]{BANNER_TITLE}[/]")
    console.print(f"[border]{'=' * 32}[/]")
    root = escape(safe_text(str(config.root_path)))
    console.print(f"Scanning: [info]{root}[/]", highlight=False, soft_wrap=True)
    if not config.is_unbounded:
        console.print(f"Max Depth: {config.max_depth}", highlight=False)


def print_tree(config: ScanConfig) -> None:
    """Print the unfiltered hierarchy under the scan root."""
    for line in iter_tree(
        config.root_path, config.max_depth, follow_symlinks=config.follow_symlinks
    ):
        print_plain(line)


def print_section(mode: OutputMode, config: ScanConfig, result: ScanResult) -> None:
    """Print the body of one report section."""
    root = str(config.root_path)
    if mode is OutputMode.TREE:
        print_tree(config)
    elif mode is OutputMode.STATS:
        for line in render_statistics(compute_statistics(result.records), root):
            print_plain(line)
    elif mode is OutputMode.JSON:
        console.print_json(safe_text(render_structured_dump(result.records, root)))
    elif mode is OutputMode.CSV:
        for line in render_tabular_dump(result.records):
            print_plain(line)
    else:
        for line in render_flat_list(result.records):
            print_plain(line)


def print_report(config: ScanConfig, result: ScanResult, *, quiet: bool = False) -> None:
    """Print all requested report sections.

    Sections render in a fixed order (tree, stats, json, csv); the flat
    list only when no other section was requested.

    Args:
        config: Configuration of the scan.
        result: Scan result to report.
        quiet: Omit banner, headings and summary.
    """
    modes = config.effective_modes

    if not quiet:
        print_banner(config)

    for mode, title in SECTION_TITLES.items():
        if mode not in modes:
            continue
        if not quiet:
            print_heading(title)
        print_section(mode, config, result)

    if not quiet:
        print_success(f"\nFound {result.total_files} files")
