# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""ClaimDesk - insurance claims back office."""

__version__ = "1.0.0"
