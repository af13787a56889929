"""CLI constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = [
    "ls", "cd", "pwd", "mkdir", "rmdir", "rm",
    "queue", "unqueue", "uploads", "upload",
    "share", "unshare", "shares", "history",
    "clear", "exit", "help",
]

FOLDER_ARG_COMMANDS = ("cd", "rmdir")
FILE_ARG_COMMANDS = ("rm",)

STYLE = Style.from_dict(
    {
        "prompt": "#2F80ED bold",
        "path": "#27AE60",
    }
)

BLUE = "\033[38;2;47;128;237m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RESET = "\033[0m"

LOGO = f"""{BLUE}
 ██████╗ ██████╗  ██████╗ ██████╗ ██╗   ██╗ █████╗ ██╗   ██╗██╗  ████████╗
 ██╔══██╗██╔══██╗██╔═══██╗██╔══██╗██║   ██║██╔══██╗██║   ██║██║  ╚══██╔══╝
 ██║  ██║██████╔╝██║   ██║██████╔╝██║   ██║███████║██║   ██║██║     ██║
 ██║  ██║██╔══██╗██║   ██║██╔═══╝ ╚██╗ ██╔╝██╔══██║██║   ██║██║     ██║
 ██████╔╝██║  ██║╚██████╔╝██║      ╚████╔╝ ██║  ██║╚██████╔╝███████╗██║
 ╚═════╝ ╚═╝  ╚═╝ ╚═════╝ ╚═╝       ╚═══╝  ╚═╝  ╚═╝ ╚═════╝ ╚══════╝╚═╝
{RESET}"""

WELCOME_TITLE = "DropVault CLI - Folders, uploads and sharing"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "dropvault"

PROGRESS_BAR_WIDTH = 24

HELP_TEXT = """Available commands:
  ls                                  List folders and files in the current folder
  cd <folder|..|/>                    Enter a subfolder, go up, or go to the root
  pwd                                 Show the current path
  mkdir <name>                        Create a folder in the current folder
  rmdir <name>                        Delete an empty subfolder
  rm <file>                           Delete a file in the current folder
  queue <path> [path...]              Add local files to the upload queue
  unqueue <upload-id>                 Remove a file from the upload queue
  uploads                             Show the upload queue
  upload                              Upload every queued file into the current folder
  share file|folder <name> [options]  Share an item
      --access view|comment|edit|admin
      --expires never|1day|7days|30days|YYYY-MM-DD
      --password <password>
      --email a@x.com,b@y.com         Send by email instead of creating a link
  unshare <share-id>                  Remove a share
  shares                              List shares and their links
  history [upload|remove|all]         Show activity history
  clear                               Clear screen and redisplay welcome message
  help                                Show this help
  exit                                Exit REPL

Examples:
  mkdir Docs
  cd Docs
  queue ./report.pdf ./photo.png
  upload
  share file report.pdf --access edit --expires 7days
  share folder Docs --email alice@example.com --password s3cret"""
