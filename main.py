"""Palette Studio development server.

Serves the palette API on top of the palette engine in ``src/palette_studio``.

Usage
-----
$ pip install -e .
$ python main.py              # starts on http://127.0.0.1:5000

Endpoints
---------
GET  /palette?color=1E4BCD&name=navy&mode=hex   50-950 palette for one hex value
GET  /palette.css?color=1E4BCD&name=navy        the same palette as CSS variables
POST /palette?model=linear|curve                palette for a saved settings document
POST /curve?num=101                             lightness curve samples for the editor
"""

from palette_studio.app import create_app

app = create_app()

if __name__ == "__main__":
    app.run(debug=False, threaded=True)
