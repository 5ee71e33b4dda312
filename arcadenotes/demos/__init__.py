"""Effect demos and their logic: fire, stereo panning and airship steering."""