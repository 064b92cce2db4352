# All measurements are in PDF points: 72 points make an inch. ReportLab's
# <b>reportlab.lib.units</b> module converts from other units.
#
# This example is listed but not run, as it only computes numbers.

from reportlab.lib.units import cm, inch, mm

print(inch, cm, mm)
