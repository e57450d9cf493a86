"""
Build metadata shown by ``--info``.

Version comes from the installed distribution; build date and revision are
injected through the environment at build or release time.
"""

from __future__ import annotations

import os
import platform
from dataclasses import dataclass
from importlib import metadata

from trading_bot import __version__

DISTRIBUTION_NAME = "trading-bot"


@dataclass(frozen=True, slots=True)
class BuildInfo:
    version: str
    build_date: str
    revision: str
    os: str
    arch: str

    def lines(self) -> list[str]:
        return [
            f"Version: {self.version}",
            f"Operating System: {self.os}",
            f"System Architecture: {self.arch}",
            f"Build Date: {self.build_date}",
            f"Build Revision: {self.revision}",
        ]


def get_build_info() -> BuildInfo:
    try:
        version = metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        version = __version__

    return BuildInfo(
        version=version,
        build_date=os.getenv("TRADING_BOT_BUILD_DATE", "unknown"),
        revision=os.getenv("TRADING_BOT_BUILD_REVISION", "unknown"),
        os=platform.system().lower() or "unknown",
        arch=platform.machine().lower() or "unknown",
    )


LICENSE_TEXT = """\
Copyright 2025 Isak Ruas
Licensed under the Apache License, Version 2.0 (the 'License');
you may not use this file except in compliance with the License.
You may obtain a copy of the License at
    http://www.apache.org/licenses/LICENSE-2.0
Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an 'AS IS' BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License."""
