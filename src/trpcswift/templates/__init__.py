# Copyright 2026 TRPCSwift Contributors
# SPDX-License-Identifier: Apache-2.0

"""Static Swift runtime support copied verbatim into every generated client."""
