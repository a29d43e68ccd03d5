"""Report renderer — builds a Markdown document from an analysis report.

Each package becomes one section; the summary line and deep-dive list wrap
the package sections.
"""

from __future__ import annotations

import os

from package_radar.domain.entities import AnalysisReport, PackageReport

_NPM_PACKAGE_URL = "https://www.npmjs.com/package"


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def _render_package(row: PackageReport) -> str:
    meta = row.metadata
    usage = row.usage

    lines = [
        f"## {meta.name} `v{meta.version or 'Unknown'}`",
        "",
        meta.description or "No description available",
        "",
        f"- Weekly downloads: {meta.weekly_downloads:,}",
        f"- Used in: {_plural(usage.count, 'file')}",
        f"- License: {meta.license}",
    ]
    if meta.error:
        lines.append(f"- Error: {meta.error}")

    lines += ["", "### Files using this package", ""]
    lines += [f"- `{os.path.basename(path)}` ({path})" for path in usage.files]

    lines += ["", "### Suggested alternatives", ""]
    if meta.alternatives:
        lines += [
            f"- [{alt}]({_NPM_PACKAGE_URL}/{alt})" for alt in meta.alternatives
        ]
    else:
        lines.append("_No alternatives suggested_")

    links = [f"[View on npm]({_NPM_PACKAGE_URL}/{meta.name})"]
    if meta.homepage:
        links.append(f"[Homepage]({meta.homepage})")
    lines += ["", " · ".join(links)]

    return "\n".join(lines)


def render_markdown(report: AnalysisReport) -> str:
    """Render *report* as a single Markdown document."""
    sections: list[str] = [
        "# PackageRadar Analysis\n\n"
        f"Analyzed **{report.files_analyzed}** files containing "
        f"**{report.packages_found}** unique npm packages."
    ]
    sections += [_render_package(row) for row in report.packages]

    if report.suggested_analysis:
        deep_dive = "\n".join(f"- {path}" for path in report.suggested_analysis)
        sections.append(f"## Suggested for closer review\n\n{deep_dive}")

    return "\n\n---\n\n".join(sections)
