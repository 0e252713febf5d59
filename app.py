from __future__ import annotations

from eip_status_radar.ui.app import main

main()
