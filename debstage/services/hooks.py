"""Generated package metadata: the control record and maintainer scripts.

Everything here is a pure function of the package identity so the content
can be checked without touching the filesystem.
"""

from __future__ import annotations

from debstage.core.package import PackageDescriptor

__all__ = [
    "CONTROL_FIELDS",
    "HOOK_RENDERERS",
    "parse_control",
    "render_control",
    "render_postinst",
    "render_postrm",
    "render_prerm",
]

SECTION = "net"
PRIORITY = "optional"

# Field order is significant to dpkg-deb.
CONTROL_FIELDS = (
    "Package",
    "Version",
    "Section",
    "Priority",
    "Architecture",
    "Maintainer",
    "Description",
)


def render_control(descriptor: PackageDescriptor) -> str:
    lines = [
        f"Package: {descriptor.name}",
        f"Version: {descriptor.version}",
        f"Section: {SECTION}",
        f"Priority: {PRIORITY}",
        f"Architecture: {descriptor.architecture}",
        f"Maintainer: {descriptor.maintainer}",
        f"Description: {descriptor.description}",
    ]
    lines += [f" {line}" for line in descriptor.long_description]
    return "\n".join(lines) + "\n"


def parse_control(text: str) -> dict[str, str]:
    """Parse a single-paragraph control record into a field mapping.

    Continuation lines (leading space) are appended to the previous field,
    newline-separated, with the leading space removed. A lone "." stands for
    an empty line, as in Debian's format.

    Raises:
        ValueError: On a line that is neither a field nor a continuation.
    """
    fields: dict[str, str] = {}
    current: str | None = None
    for raw in text.splitlines():
        if not raw.strip():
            continue
        if raw[0] in " \t":
            if current is None:
                raise ValueError(f"continuation line before any field: {raw!r}")
            body = raw[1:]
            fields[current] += "\n" + ("" if body == "." else body)
            continue
        key, sep, value = raw.partition(":")
        if not sep or not key.strip():
            raise ValueError(f"malformed control line: {raw!r}")
        current = key.strip()
        fields[current] = value.strip()
    return fields


def render_postinst(service: str) -> str:
    return f"""#!/bin/bash
set -e

# Reload systemd daemon
systemctl daemon-reload

# Enable and start the timer
systemctl enable {service}.timer
systemctl start {service}.timer

echo "{service} timer has been enabled and started."
echo "Use 'systemctl status {service}.timer' to check its status."

exit 0
"""


def render_prerm(service: str) -> str:
    # Stop/disable must not block removal when the units are already down.
    return f"""#!/bin/bash
set -e

# Stop and disable the timer
systemctl stop {service}.timer 2>/dev/null || true
systemctl disable {service}.timer 2>/dev/null || true

# Stop the service if running
systemctl stop {service}.service 2>/dev/null || true

exit 0
"""


def render_postrm(service: str) -> str:
    # `service` is unused; every entry in HOOK_RENDERERS takes the service name.
    return """#!/bin/bash
set -e

# Reload systemd daemon
systemctl daemon-reload

exit 0
"""


# Slot name in the metadata directory -> renderer.
HOOK_RENDERERS = {
    "postinst": render_postinst,
    "prerm": render_prerm,
    "postrm": render_postrm,
}
