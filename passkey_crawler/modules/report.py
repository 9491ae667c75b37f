from datetime import datetime
from typing import List
from passkey_crawler.modules.models import BatchReport


RULE = "=" * 70
SUBRULE = "-" * 70


def format_summary(report: BatchReport) -> List[str]:
    return [
        f"Total Sites Tested: {report.tested}",
        f"Total URLs Tested: {report.urls_tested}",
        f"✓ Sites with Passkey Support: {report.with_passkey}",
        f"✗ Sites without Passkey Support: {report.without_passkey}",
        f"Success Rate: {report.success_rate:.1f}%"
    ]


def format_report(report: BatchReport, tested_at: datetime) -> str:
    lines = [
        RULE,
        "PASSKEY DETECTION TEST RESULTS",
        RULE,
        f"Test Date: {tested_at.strftime('%Y-%m-%d %H:%M:%S')}",
        f"Total Sites Tested: {report.tested}",
        f"Total URLs Tested: {report.urls_tested}",
        RULE,
        "",
        "SUMMARY",
        SUBRULE,
        *format_summary(report),
        RULE,
        ""
    ]

    positives = [s for s in report.sites if report.site_has_passkey(s)]
    negatives = [s for s in report.sites if not report.site_has_passkey(s)]

    # one entry per site, the positive one shows the url that had passkey support
    if positives:
        lines += ["SITES WITH PASSKEY SUPPORT:", SUBRULE]
        for i, site in enumerate(positives, 1):
            r = next(v for v in report.sites[site] if v.has_passkey)
            lines += [
                f"{i}. {r.url}",
                f"   Title: {r.title or 'Unknown'}",
                f"   Detection Method: {r.method or 'N/A'}",
                f"   Passkey Found At: {r.found_at_url or 'N/A'}",
                ""
            ]
        lines.append("")

    if negatives:
        lines += ["SITES WITHOUT PASSKEY SUPPORT:", SUBRULE]
        for i, site in enumerate(negatives, 1):
            lines.append(f"{i}. {site}")
            for r in report.sites[site]:
                if r.url != site:
                    lines.append(f"   URL: {r.url}")
                if r.error:
                    lines.append(f"   Error: {r.error}")
            lines.append("")

    lines += [RULE, "END OF REPORT", RULE]
    return "\n".join(lines) + "\n"
