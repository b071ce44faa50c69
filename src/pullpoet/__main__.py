# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 PullPoet
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, see <https://www.gnu.org/licenses/>.
#  */
# -----------------------------------------------------------------------------

from pullpoet.cli import run_app

if __name__ == "__main__":
    run_app()
