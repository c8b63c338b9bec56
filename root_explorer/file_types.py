import os

FOLDER_KIND = "File folder"

# Friendly names for common extensions; anything else falls back to "<EXT> File"
KIND_LABELS = {
	".txt": "Text Document",
	".log": "Text Document",
	".md": "Markdown File",
	".csv": "CSV File",
	".json": "JSON File",
	".xml": "XML Document",
	".yaml": "YAML File",
	".yml": "YAML File",
	".ini": "Configuration Settings",
	".cfg": "Configuration Settings",
	".html": "HTML Document",
	".htm": "HTML Document",
	".css": "Cascading Style Sheet Document",
	".js": "JavaScript File",
	".py": "Python File",
	".pdf": "PDF Document",
	".doc": "Microsoft Word 97-2003 Document",
	".docx": "Microsoft Word Document",
	".xls": "Microsoft Excel 97-2003 Worksheet",
	".xlsx": "Microsoft Excel Worksheet",
	".ppt": "Microsoft PowerPoint 97-2003 Presentation",
	".pptx": "Microsoft PowerPoint Presentation",
	".jpg": "JPEG Image",
	".jpeg": "JPEG Image",
	".png": "PNG Image",
	".gif": "GIF Image",
	".bmp": "Bitmap Image",
	".svg": "SVG Image",
	".webp": "WebP Image",
	".mp3": "MP3 Audio File",
	".wav": "WAV Audio File",
	".mp4": "MP4 Video",
	".mkv": "Matroska Video",
	".avi": "AVI Video",
	".zip": "Compressed (zipped) Folder",
	".7z": "7Z Archive",
	".tar": "TAR Archive",
	".gz": "GZ Archive",
	".exe": "Application",
	".dll": "Application extension",
	".bat": "Windows Batch File",
	".sh": "Shell Script",
}


def kind_for(name: str) -> str:
	"""Human-readable file type label for a file name."""
	ext = os.path.splitext(name)[1].lower()
	if not ext:
		return "File"
	return KIND_LABELS.get(ext, f"{ext[1:].upper()} File")
