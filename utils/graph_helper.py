from typing import List
import pyqtgraph as pg

def setup_wpm_plot(plot_widget: pg.PlotWidget, line_color: str):
    plot_widget.setBackground(None)
    plot_widget.showGrid(x=False, y=True, alpha=0.15)
    plot_widget.setMenuEnabled(False)
    plot_widget.setMouseEnabled(x=False, y=False)
    plot_widget.hideButtons()
    plot_widget.setLabel('left', 'WPM')
    plot_widget.setLabel('bottom', 'Attempt')
    curve = plot_widget.plot([], [], pen=pg.mkPen(line_color, width=2.5), symbol='o', symbolSize=6, antialias=True)
    return curve

def update_curve(curve, y: List[float]):
    x = list(range(1, len(y) + 1))
    curve.setData(x, y)

def setup_pause_bars(plot_widget: pg.PlotWidget, color: str):
    plot_widget.setBackground(None)
    plot_widget.showGrid(x=False, y=True, alpha=0.08)
    plot_widget.setMenuEnabled(False)
    plot_widget.setMouseEnabled(x=False, y=False)
    plot_widget.hideButtons()
    plot_widget.setLabel('left', 'Pause (s)')
    plot_widget.setLabel('bottom', 'Position')
    bars = pg.BarGraphItem(x=[], height=[], width=0.8, brush=color)
    plot_widget.addItem(bars)
    return bars

def update_bars(bars, positions: List[int], seconds: List[float]):
    bars.setOpts(x=positions, height=seconds, width=0.8)
