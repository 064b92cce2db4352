# Each shape can be stroked, filled, or both. Rectangles are given by their
# top-left corner, width and height; circles by their centre and radius.

pdf.stroke_axis()
pdf.stroke_rectangle((0, 250), 100, 100)
pdf.fill_rectangle((150, 250), 100, 100)
pdf.stroke_circle((350, 200), 50)
pdf.fill_circle((350, 200), 20)
