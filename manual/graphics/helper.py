# <b>stroke_axis</b> draws a labelled ruler along both axes. Pass <b>width</b>
# or <b>height</b> to limit it.

pdf.stroke_axis(width=300, height=200)
