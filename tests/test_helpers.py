"""Helpers shared across optdoc tests."""

import shutil
import subprocess

EXAMPLE_SCRIPT = """\
#!/bin/bash
# Usage: demo [options] args...
#
# Demonstrates option declarations.
#
# Options:
#   -a --Aa x    The -a (or --Aa) option takes a parameter "x".
#                Default: Default value for a
#   -b --Bb      The -b/--Bb switch does not take any parameters, but it does
#                have a rather long description.

echo "body"
"""


def bash_runtime_available() -> bool:
    """True when bash 4+ and util-linux getopt are on PATH."""
    bash = shutil.which("bash")
    getopt_bin = shutil.which("getopt")
    if bash is None or getopt_bin is None:
        return False
    version = subprocess.run(
        [bash, "-c", "echo ${BASH_VERSINFO[0]}"],
        capture_output=True,
        text=True,
        check=False,
    )
    if not version.stdout.strip().isdigit() or int(version.stdout.strip()) < 4:
        return False
    # Enhanced getopt exits with status 4 for -T.
    enhanced = subprocess.run([getopt_bin, "-T"], capture_output=True, check=False)
    return enhanced.returncode == 4
