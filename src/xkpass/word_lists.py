"""Bundled word lists.

``DEFAULT_WORDS`` is plain data: ``WordSource`` sanitises, deduplicates and
filters it like any other source.
"""

from typing import Tuple


DEFAULT_WORDS: Tuple[str, ...] = tuple(
    """
    able acid anchor apex april aqua arch arcade area atlas aurora autumn axis
    bake band bank banner basil beacon beam bell berry beta blink bloom blue
    bold border born brave breeze bright brim brisk bucket bulk butter cactus
    calm camp canal candle canvas canyon care carpet cascade cast castle cello
    charm cherry chop cinder citron city clay cliché climb clip cloud clover
    cobalt comet cool copper core cosmic craft crane creek crew crisp crop cube
    daisy dawn deal deep delta desert dock down dragon draw drift drum dune
    dusk eagle east easy echo edge ember epic even fable fair falcon fast
    feather feed fennel field fine firm fish flat flint flow fold forest form
    fountain fox free fresco frost gain garden gate gear glacier glad glade
    glimmer glow gold good grain granite grid grow gust half hammer hand
    harbor hard harvest hawk hear help hike hill hold home honey hood hope
    horizon host hush idea idle inch iron island item jacket jade jazz join
    jubilant jump june just keen keep kelp kettle kind king kite lagoon lake
    lamp land lane lantern last lattice leaf left lemon lift lilac line link
    list live loft long look luck lumen made main make maple marble mark mass
    meadow meal midnight mild mint mirage mist monarch mono moon morning moss
    muse nail near nebula nectar nest next noble note oasis olive opal open
    oracle orbit orchid pack pair palm park pass past path peak pearl peer
    pepper perk pine pioneer pixel plan plasma play plot plum plume plus
    prairie pure push quad quartz quick quiet quiver radial rain rank raven
    real reed rest ribbon ring ripple river road rock root rose rover rule
    rush sable saffron sage salt sand seat seed send sequoia shadow ship shop
    shot show side sierra sign signal silk silver sing site size slim slow
    soar soft soil solace solar solo song sonic soul spectrum spin spring star
    stay stellar step stone straw suit summit sunset sure swim tale tall task
    team tell terra tide timber time town trail tranquil tree true tune turn
    twilight twin unit vale vast vector velvet verb verdant view vine vivid
    wander warm wave weak west whim whisper wide wild willow wind wing winter
    wise wood yard year yarn yell young zeal zenith zephyr zest zone
    """.split()
)
