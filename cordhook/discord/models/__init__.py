from .application_command import *
from .interaction import *
from .response import *
from .enums import *


__all__ = (
    # application_command.py
    'ApplicationCommand',
    'ApplicationCommandOption',
    'ApplicationCommandOptionChoice',
    'AutocompleteValue',
    'ContextMenuCommand',
    'SlashCommand',
    # interaction.py
    'ApplicationCommandInteractionData',
    'ApplicationCommandInteractionDataOption',
    'Interaction',
    'InteractionCallback',
    'MessageComponentInteractionData',
    'ModalSubmitInteractionData',
    # response.py
    'Attachment',
    'InteractionResponse',
    'Reply',
    'StructuredReply',
    'TextReply',
    'create_multipart',
    # enums.py
    'MessageFlag',
    'ApplicationCommandType',
    'ApplicationCommandOptionType',
    'InteractionType',
    'InteractionCallbackType',
)
