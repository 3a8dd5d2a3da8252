from . import main_encrypt

main_encrypt()
