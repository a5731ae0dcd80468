"""
Style defaults used during layout and playback

All lengths are given in staff spaces (sp) unless stated otherwise. A
:class:`~sforzando.score.Score` can override any of these per score::

    >>> from sforzando.score import Score
    >>> score = Score(style={'dynamicsMinDistance': 1.0})

"""
import configdict

config = configdict.CheckedDict()
config.addKey('spatium', 5.0, type=float, range=(0.5, 50),
              doc='Distance between two staff lines, in points')
config.addKey('dynamicsPlacement', 'below', choices=('above', 'below'),
              doc='Default placement of dynamics relative to the staff')
config.addKey('dynamicsMinDistance', 0.5, type=float, range=(0, 10),
              doc='Min. clearance (in sp) between a dynamic and other elements '
                  'when autoplacing')
config.addKey('dynamicsFontSize', 10.0, type=float, range=(1, 72),
              doc='Font size (in points) of dynamics')
config.addKey('dynamicsAlign', 'hcenter', choices=('left', 'hcenter', 'right'),
              doc='Horizontal alignment of dynamics')
config.addKey('dynamicsPosAbove', -2.0, type=float,
              doc='Vertical offset (in sp) of dynamics placed above the staff')
config.addKey('dynamicsPosBelow', 2.5, type=float,
              doc='Vertical offset (in sp) of dynamics placed below the staff')
config.addKey('dynamicsAutoplace', True, type=bool,
              doc='Move dynamics vertically to avoid collisions')
config.addKey('referenceTempo', 120.0, type=float, range=(1, 1000),
              doc='Quarter tempo at which velocity changes take their nominal duration')
config.addKey('division', 480, type=int, range=(1, 100000),
              doc='Ticks per quarter note')
config.addKey('glyphMetricsPath', '', type=str,
              doc='Path to a yaml file with glyph metrics. If not given, the '
                  'bundled metrics are used')

config.load()
