# SPDX-License-Identifier: GPL-3.0-or-later

APP_ID = 'io.github.tidynotes.TidyNotes'

AUTOSAVE_DELAY_MS = 500

# All notes live under one key so every write is a whole replacement.
STORAGE_KEY = 'tidynotes:notes'

# Markup handed to the editing engine when a note has nothing to show.
EMPTY_DOCUMENT = '<p></p>'

PREVIEW_LENGTH = 200

UNTITLED = 'Untitled'
