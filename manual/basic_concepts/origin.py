# The origin of the coordinate space is the bottom-left corner of the margin
# box. <b>stroke_axis</b> draws rulers from the origin so the other examples
# can show where things land.
#
# Drawing with absolute coordinates does not move the cursor.

pdf.stroke_axis()
pdf.stroke_circle((0, 0), 10)
pdf.draw_text("origin", at=(15, 5))
