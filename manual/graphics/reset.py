# Settings changed by one example never reach the next: after every example the
# font, line width, line caps and joins, dashes and colours go back to their
# defaults.

pdf.text(f"font: {pdf.style.font_name} {pdf.style.font_size}")
pdf.text(f"line width: {pdf.line_width}, dashed: {pdf.dashed}")
pdf.text(f"fill: {pdf.fill_color}, stroke: {pdf.stroke_color}")
