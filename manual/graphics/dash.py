# <b>dash</b> strokes lines as a pattern of dashes and gaps. The first number
# is the dash length, <b>space</b> the gap. <b>undash</b> goes back to solid
# lines.

pdf.stroke_axis()
y = 250
for length, space in ((1, 1), (3, 3), (10, 4), (20, 10)):
    pdf.dash(length, space=space)
    pdf.stroke_horizontal_line(0, 300, at=y)
    y -= 40
pdf.undash()
pdf.stroke_horizontal_line(0, 300, at=y)
