"""Russian message catalog."""

MESSAGES: dict = {
    "app": {
        "title": "Загрузчик видео",
        "disclaimer": "Используя программу, вы соглашаетесь с",
        "terms_of_use": "Условиями использования",
        "goodbye": "До встречи!",
    },
    "common": {
        "select_option": "Выберите действие:",
        "yes": "Да",
        "no": "Нет",
        "success": "Готово",
        "error": "Ошибка: {message}",
        "cancelled": "Отменено",
        "required": "Выберите хотя бы один вариант",
        "empty": "Значение не может быть пустым",
        "loading": "Выполняется...",
    },
    "menu": {
        "download_video": "Скачать видео",
        "settings": "Настройки",
        "exit": "Выход",
    },
    "language": {
        "first_run": "Select your language / Выберите язык:",
        "select": "Выберите язык",
        "en": "English",
        "ru": "Русский",
    },
    "settings": {
        "title": "Настройки",
        "default_download_path": "Папка для загрузки",
        "default_filename": "Шаблон имени файла",
        "filename_hint": "Подстановки: {title}, {uploader}, {upload_date}, {id}. Пусто — название видео.",
        "preferred_quality": "Предпочитаемое качество",
        "download_cover": "Скачивать обложку",
        "download_description": "Скачивать описание",
        "debug": "Режим отладки",
        "browser": "Браузер для cookies",
        "mp3_bitrate": "Битрейт MP3",
        "language": "Язык",
        "install_globally": "Установить глобально",
        "save": "Сохранить и выйти",
        "saved": "Настройки сохранены в {path}",
    },
    "qualities": {
        "highest": "Максимальное",
        "mp3": "MP3 (только звук)",
    },
    "browsers": {
        "none": "Не использовать",
    },
    "bitrates": {
        "64": "64 кбит/с (низкое)",
        "96": "96 кбит/с",
        "128": "128 кбит/с (стандарт)",
        "192": "192 кбит/с",
        "256": "256 кбит/с",
        "320": "320 кбит/с (лучшее)",
    },
    "download": {
        "enter_url": "Введите ссылку на видео:",
        "getting_video_info": "Получаю информацию о видео...",
        "enter_filename": "Имя файла:",
        "enter_path": "Папка для загрузки:",
        "getting_format_sizes": "Получаю доступные форматы...",
        "video_preview": "Предпросмотр",
        "video_title": "Название: {title}",
        "video_uploader": "Автор: {uploader}",
        "video_description": "Описание:",
        "download_cover_question": "Скачать обложку?",
        "description_options": "Что сделать с описанием?",
        "description_download": "Сохранить в файл",
        "description_copy": "Скопировать в буфер обмена",
        "description_skip": "Пропустить",
        "description_copied": "Описание скопировано в буфер обмена",
        "copy_failed": "Не удалось скопировать: {message}",
        "select_quality": "Выберите форматы (пробел — отметить):",
        "no_formats": "Для этого видео не найдено доступных форматов",
        "confirm_download": "Начать загрузку?",
        "downloading": "Загрузка...",
        "downloading_cover": "Скачиваю обложку...",
        "downloading_description": "Скачиваю описание...",
        "cover_downloaded": "Обложка скачана",
        "description_downloaded": "Описание скачано",
        "file_saved": "{filename} ({quality}) - {size}",
        "file_failed": "Ошибка загрузки {filename}",
        "download_complete": "Загрузка завершена!",
        "total_files": "Файлов: {count}",
        "total_size": "Общий размер: {size} МБ",
        "file_info": "  {filename} [{quality}] {size} МБ",
    },
    "dependencies": {
        "downloading": "Скачиваю {name}...",
        "extracting": "Распаковываю {name}...",
        "searching": "Ищу {name} в архиве...",
        "using_module": "Используется встроенный Python-пакет yt-dlp",
        "ffmpeg_not_found": "ffmpeg не найден: объединение форматов и конвертация в MP3 работать не будут",
        "init_failed": "Не удалось подготовить необходимые программы",
    },
    "auth": {
        "required": "Сайт требует авторизацию",
        "youtube_bot": "YouTube просит подтвердить, что вы не бот.",
        "solution": "Как исправить:",
        "step1": "1. Войдите на сайт в браузере",
        "step2": "2. Откройте Настройки -> Браузер для cookies",
        "step3": "3. Выберите браузер, в котором выполнен вход",
        "step4": "4. Сохраните настройки и повторите попытку",
    },
    "install": {
        "windows_not_supported": "Глобальная установка не поддерживается в Windows",
        "select_method": "Способ установки:",
        "symlink": "Символическая ссылка в /usr/local/bin",
        "copy": "Копия в /usr/local/bin",
        "add_to_path": "Добавить в PATH в конфиге оболочки",
        "enter_alias": "Имя команды:",
        "overwrite": "Файл уже существует. Перезаписать?",
        "symlink_created": "Ссылка создана: {path} -> {target}",
        "copy_created": "Скопировано в {path}",
        "path_updated": "Обновлён {config}",
        "already_in_path": "{config} уже содержит эту папку",
        "restart_terminal": "Перезапустите терминал или выполните: source {config}",
        "permission_denied": "Недостаточно прав. Повторите с sudo.",
    },
}
