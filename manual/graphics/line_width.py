# <b>line_width</b> sets the thickness of stroked lines. It stays in effect
# until it is changed again.

pdf.stroke_axis()
y = 250
for width in (1, 2, 4, 8):
    pdf.line_width = width
    pdf.stroke_horizontal_line(0, 300, at=y)
    pdf.draw_text(f"{width}pt", at=(310, y - 3))
    y -= 40
