from dify_plugin import Plugin, DifyPluginEnv
import logging

plugin = Plugin(DifyPluginEnv(MAX_REQUEST_TIMEOUT=120))

# global logging configuration
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler()
    ]
)

# only warnings and errors from the plugin runtime itself
logging.getLogger('dify_plugin').setLevel(logging.WARNING)
logging.getLogger('dify_plugin.core.server.tcp.request_reader').setLevel(logging.WARNING)

if __name__ == '__main__':
    plugin.run()
