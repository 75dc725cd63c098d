#===============================================================================
#  LeaderKey  |  Keystroke-driven Command Launcher
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  A "leader key" launcher: short key sequences map to actions (open an
#  application, a URL, a folder, run a shell command) or to nested groups of
#  further actions. Type one key at a time, or press Tab to search the whole
#  tree and then lock the results and type a result's key-path.
#
#  Data Conventions
#  ----------------
#    ~/.leaderkey/                (override with $LEADERKEY_HOME)
#      - storage.json              -> action tree (+ legacy mappings, if any)
#      - preferences.json          -> idle timeout settings
#      - logs/leaderkey.log        -> application log
#      - logs/commands.log         -> output of shell command actions
#
#  Copyright & License Notes
#  -------------------------
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#
#  This source code is provided "AS IS", without warranty of any kind, express
#  or implied, including but not limited to the warranties of merchantability,
#  fitness for a particular purpose, and noninfringement.
#
#  Permission Notice (Personal/Internal Use)
#  -----------------------------------------
#  You may use, copy, and modify this software for personal or internal use.
#  Redistribution or public release should include this header and credit the
#  author. If you plan to open-source this project, consider replacing this
#  section with an OSI-approved license (e.g., MIT) for clarity.
#
#  Third-Party Components
#  ----------------------
#  This project uses third-party libraries (e.g., PySide6) which are licensed
#  separately by their respective authors. Ensure compliance with their
#  license terms when distributing this software.
#===============================================================================

from leaderkey.main_window import main


if __name__ == "__main__":
    raise SystemExit(main())
