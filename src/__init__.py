"""
AirshipLiftAnalyzer - Main Package
==================================

Atmospheric and buoyant-lift calculation engine for airship sizing.

This package provides modules for:
- Lift Analysis (lift_analyzer): ISA atmosphere model, envelope volume and
  excess lift solver, lift-to-weight trend classification

Author: AirshipLiftAnalyzer Team
License: See LICENSE file in project root
"""

__version__ = "0.1.0"
__author__ = "AirshipLiftAnalyzer Team"
