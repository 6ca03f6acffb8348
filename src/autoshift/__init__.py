# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# Keyboard type stages
# host level:
# stage 0: host text-input system issues edits (insert, delete, keyboard switch, autocapitalization change)

# autoshift level:
# stage 1: apply each edit to the keyboard context and switch to the preferred keyboard type
# stage 2: drop edits that left the keyboard type alone
