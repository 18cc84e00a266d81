"""English message catalog (the fallback for every other language)."""

MESSAGES: dict = {
    "app": {
        "title": "Video Downloader",
        "disclaimer": "By using this tool you agree to the",
        "terms_of_use": "Terms of Use",
        "goodbye": "Bye!",
    },
    "common": {
        "select_option": "Select an option:",
        "yes": "Yes",
        "no": "No",
        "success": "Done",
        "error": "Error: {message}",
        "cancelled": "Cancelled",
        "required": "Please select at least one option",
        "empty": "The value must not be empty",
        "loading": "Working...",
    },
    "menu": {
        "download_video": "Download video",
        "settings": "Settings",
        "exit": "Exit",
    },
    "language": {
        "first_run": "Select your language / Выберите язык:",
        "select": "Select language",
        "en": "English",
        "ru": "Русский",
    },
    "settings": {
        "title": "Settings",
        "default_download_path": "Default download path",
        "default_filename": "Default filename template",
        "filename_hint": "Placeholders: {title}, {uploader}, {upload_date}, {id}. Leave empty to use the title.",
        "preferred_quality": "Preferred quality",
        "download_cover": "Download cover",
        "download_description": "Download description",
        "debug": "Debug mode",
        "browser": "Browser for cookies",
        "mp3_bitrate": "MP3 bitrate",
        "language": "Language",
        "install_globally": "Install globally",
        "save": "Save and return",
        "saved": "Settings saved to {path}",
    },
    "qualities": {
        "highest": "Highest available",
        "mp3": "MP3 (audio only)",
    },
    "browsers": {
        "none": "None",
    },
    "bitrates": {
        "64": "64 kbps (low)",
        "96": "96 kbps",
        "128": "128 kbps (standard)",
        "192": "192 kbps",
        "256": "256 kbps",
        "320": "320 kbps (best)",
    },
    "download": {
        "enter_url": "Enter video URL:",
        "getting_video_info": "Getting video information...",
        "enter_filename": "File name:",
        "enter_path": "Download directory:",
        "getting_format_sizes": "Getting available formats...",
        "video_preview": "Video preview",
        "video_title": "Title: {title}",
        "video_uploader": "Author: {uploader}",
        "video_description": "Description:",
        "download_cover_question": "Download the cover image?",
        "description_options": "What to do with the description?",
        "description_download": "Save to a file",
        "description_copy": "Copy to clipboard",
        "description_skip": "Skip",
        "description_copied": "Description copied to clipboard",
        "copy_failed": "Failed to copy to clipboard: {message}",
        "select_quality": "Select formats to download (space to toggle):",
        "no_formats": "No available formats found for this video",
        "confirm_download": "Start download?",
        "downloading": "Downloading...",
        "downloading_cover": "Downloading cover...",
        "downloading_description": "Downloading description...",
        "cover_downloaded": "Cover downloaded",
        "description_downloaded": "Description downloaded",
        "file_saved": "{filename} ({quality}) - {size}",
        "file_failed": "Failed to download {filename}",
        "download_complete": "Download complete!",
        "total_files": "Files: {count}",
        "total_size": "Total size: {size} MB",
        "file_info": "  {filename} [{quality}] {size} MB",
    },
    "dependencies": {
        "downloading": "Downloading {name}...",
        "extracting": "Extracting {name}...",
        "searching": "Looking for {name} in the archive...",
        "using_module": "Using the bundled yt-dlp Python package",
        "ffmpeg_not_found": "ffmpeg was not found: merging formats and MP3 conversion will not work",
        "init_failed": "Could not prepare the required tools",
    },
    "auth": {
        "required": "The site requires authentication",
        "youtube_bot": "YouTube asks to confirm that you are not a bot.",
        "solution": "How to fix:",
        "step1": "1. Sign in to the site in your browser",
        "step2": "2. Open Settings -> Browser for cookies",
        "step3": "3. Pick the browser you signed in with",
        "step4": "4. Save the settings and try again",
    },
    "install": {
        "windows_not_supported": "Global install is not supported on Windows",
        "select_method": "Installation method:",
        "symlink": "Symlink to /usr/local/bin",
        "copy": "Copy to /usr/local/bin",
        "add_to_path": "Add to PATH in the shell config",
        "enter_alias": "Command name:",
        "overwrite": "The file already exists. Overwrite?",
        "symlink_created": "Symlink created: {path} -> {target}",
        "copy_created": "Copied to {path}",
        "path_updated": "Updated {config}",
        "already_in_path": "{config} already references this directory",
        "restart_terminal": "Restart the terminal or run: source {config}",
        "permission_denied": "Permission denied. Try again with sudo.",
    },
}
